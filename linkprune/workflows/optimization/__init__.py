"""
Optimization workflows.
"""
