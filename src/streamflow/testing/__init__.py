"""Testing – in-memory fakes for unit tests and local runs."""
