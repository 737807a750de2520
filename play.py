import sys

from llmtictactoe.cli import main

if __name__ == "__main__":
    sys.exit(main())
