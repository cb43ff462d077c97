from binelek_mcp.server import main

main()
