"""Schema explorer: snapshot model, object tree, and fuzzy object search."""
