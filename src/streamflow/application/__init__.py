"""Application layer – delivery pipeline, queries, pagination and the service facade."""
