"""Allow ``python -m xlagent``."""

from xlagent.cli import main

main()
