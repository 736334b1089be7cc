"""
Canonicalization of Dart-like functions on the way to continuation-passing style.
"""
