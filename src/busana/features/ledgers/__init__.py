"""Side ledgers feeding net profit: advertising, affiliate endorsements and cash flow.

Not every deployment imports these, so readers must tolerate the tables
being empty or missing.
"""
