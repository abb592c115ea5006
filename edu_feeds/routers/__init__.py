"""HTTP routers for the query surface."""
