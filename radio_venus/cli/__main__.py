"""Allow ``python -m radio_venus.cli`` execution."""

from radio_venus.cli.curate import main

main()
