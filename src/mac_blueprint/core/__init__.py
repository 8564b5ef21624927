"""Blueprint core: schema, validation, version policy and diffing.

The core never touches the operating system; it works on plain
JSON-compatible documents handed to it by the adapters and the CLI.
"""
