"""Run the prsight MCP server: ``python -m prsight``."""

from prsight.server.app import main

main()
