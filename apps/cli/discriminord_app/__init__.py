"""Command line front end for discriminord."""
