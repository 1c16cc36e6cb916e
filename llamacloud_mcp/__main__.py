from llamacloud_mcp.mcp_server.stdio_server import main

main()
