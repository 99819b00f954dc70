"""Alphabets and intervals consumed by the alignment engine."""
