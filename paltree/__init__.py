"""Paltree - hierarchical command trees for command palettes.

A query typed in the palette is split into tokens, matched against a tree of
named commands and routed to the deepest matching command, which lists its
sub-commands as suggestions or runs its action.
"""
