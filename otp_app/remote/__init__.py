"""
Deferred reference resolution module.

Reference cells that hold either an inline value or a locator, the
Resolvable capability that walks a decoded graph, the session decoder that
fetches, decodes and caches referenced documents, and the pluggable fetch
transports and document formats it relies on.
"""
