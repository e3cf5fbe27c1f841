"""
Platform query helpers.

This subpackage groups the thin environment queries: Android API level
predicates and external storage state in :mod:`.platform_version`, and
network interface state in :mod:`.connectivity`.  They read live system
state and have no side effects.
"""
