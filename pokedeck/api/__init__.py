"""HTTP glue shared by the routers (dependencies and error handlers)."""
