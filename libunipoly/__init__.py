"""
Univariate polynomial arithmetic over the integers, the rationals and prime fields: dense multiplication, polynomial
remainder sequences with resultants and subresultants, and factorization over GF(p) and Z.
"""
