"""AWS API instrumentation."""
