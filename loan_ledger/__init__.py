"""
Loan Ledger - Loan Accounting Engine

A pure-calculation library that computes loan origination amounts,
renewal profit inheritance, and the profit/capital split of each payment
for weekly-installment microfinance loans.
"""

__version__ = "0.1.0"
