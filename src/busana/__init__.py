"""Busana Reports: monthly KPI trend reporting for the fashion store backend."""
