"""Infrastructure layer: XML rendering, file output and logging adapters."""
