"""Built-in operator families.

Each module exposes an ``OPERATORS`` mapping of name -> operator. Packs
in ``json_expressions.packs`` combine them into ready-made registries.
"""
