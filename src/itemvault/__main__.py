"""Entry point for 'python -m itemvault' command."""

from itemvault.cli import main

if __name__ == "__main__":
    main()
