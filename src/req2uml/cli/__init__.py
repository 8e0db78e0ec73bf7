"""req2uml command-line interface."""
