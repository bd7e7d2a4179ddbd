"""Domain modules: catalog, watch streams and counting."""
