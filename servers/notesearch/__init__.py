"""Note search MCP server and command-line front end."""
