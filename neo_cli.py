"""CLI entry point - wrapper running the main CLI from the cli package"""

from cli.main import main

if __name__ == "__main__":
    main()
