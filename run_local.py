#!/usr/bin/env python3
"""
Simple runner for local development.
"""

import os
import sys

# Add debug output
print("Starting GA4 MCP Server...", file=sys.stderr)
print(f"Python version: {sys.version}", file=sys.stderr)
print(f"Current working directory: {os.getcwd()}", file=sys.stderr)
print(f"Environment variables set: GA_PROPERTY_ID={bool(os.getenv('GA_PROPERTY_ID'))}", file=sys.stderr)

# Add the src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

try:
    from ga4_mcp_server.server import main
except ImportError as e:
    print(f"Import error: {e}", file=sys.stderr)
    sys.exit(1)

if __name__ == "__main__":
    main()
