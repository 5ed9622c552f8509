"""
Protocol timeline CLI package.

This package contains a small CLI tool that:
- parses a dated message transcript into intro metadata and message records,
  flagging missing fields instead of dropping data,
- picks a preview image for each message based on its referenced documents,
- writes both results as JSON for the scrolling presentation page.
"""
