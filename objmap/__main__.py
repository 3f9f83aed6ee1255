"""Entry point for ``python -m objmap``."""
from objmap.cli.main import main

main()
