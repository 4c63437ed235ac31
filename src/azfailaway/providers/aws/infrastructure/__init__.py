"""AWS infrastructure: client, handlers, persistence and instrumentation."""
