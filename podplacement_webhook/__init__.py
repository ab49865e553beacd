"""Mutating admission webhook that gates new pods until their image architectures are resolved."""
