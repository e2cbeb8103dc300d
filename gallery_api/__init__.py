"""GraphQL HTTP service for the image gallery."""
