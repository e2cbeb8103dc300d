"""Shared configuration, models and storage for the image gallery API."""
