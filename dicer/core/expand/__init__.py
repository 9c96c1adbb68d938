"""Template expansion: normalize, scan, then evaluate each placeholder in order.

`expand_result` is the primary entry point and returns a tagged result;
`expand` wraps it for callers that prefer exceptions.
"""
