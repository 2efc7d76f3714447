"""Ethereum virtual machine primitives: hash types, fork ids, state, environment, database interfaces and precompiled contracts."""

__version__ = "0.1.0"