"""Bundled plugins.

A plugin module exposes an `Extension` class deriving from
`paltree.plugins.interface.Plugin`.
"""
