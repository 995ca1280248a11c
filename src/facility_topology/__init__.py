"""Digital Twins topology client and space hierarchy builder."""
