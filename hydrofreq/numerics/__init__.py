"""Numerical collaborators: special functions, root finding, derivatives,
quadrature and bounded optimization."""
