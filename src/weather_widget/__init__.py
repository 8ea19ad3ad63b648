"""Weather widget: location resolution, weather lookup, and report dispatch."""
