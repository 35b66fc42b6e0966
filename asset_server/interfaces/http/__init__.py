"""HTTP interface: routers, dependencies and the response envelope."""
