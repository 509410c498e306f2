"""
CSQ annotation package.

Modules are grouped into data primitives (field splitting, lookup tables, VCF
text helpers), annotation transforms, host pipelines, and utilities so the
per-record core stays small and testable on its own.
"""
