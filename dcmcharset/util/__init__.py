"""Tools for working with the converted output of character strings."""
