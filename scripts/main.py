# scripts/main.py

from particle_life.__main__ import main

if __name__ == "__main__":
    main()
