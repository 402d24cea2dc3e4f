"""Web layer for the node portal: blueprints, templates and helpers."""
