"""Top-level package for the CSAir route network project.

The package loads the airline network from a JSON document and answers
descriptive queries about it: city metadata, one-hop connections,
network-wide extremes and aggregate statistics.
"""
