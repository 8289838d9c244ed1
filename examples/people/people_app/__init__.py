"""Sample host application exposing a People service."""
