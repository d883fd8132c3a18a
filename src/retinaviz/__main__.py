"""Command-line interface."""
from retinaviz.main import main

if __name__ == "__main__":
    main()
