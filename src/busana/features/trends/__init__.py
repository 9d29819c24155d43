"""Month-over-month KPI trends for the dashboard.

The newest sales record decides which month is "current"; every KPI is
aggregated for that month and the one before it and compared per metric.
Advertising spend and affiliate endorsement fees count as improving when
they go down. Results are recomputed on every request and never stored.
"""
