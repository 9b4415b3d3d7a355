"""Core JSON processing for Parson.

The modules in this package perform no terminal I/O: they resolve queries,
format values and process files, raising ``ParsonError`` subclasses on failure.
"""
