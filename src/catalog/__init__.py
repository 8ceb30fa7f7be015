"""Product catalog: entity graph, search descriptor and search service."""
