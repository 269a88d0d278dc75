"""Static blog generator with open-graph images and an RSS feed."""
