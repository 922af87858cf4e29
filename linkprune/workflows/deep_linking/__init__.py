"""
Deep linking workflows.
"""
