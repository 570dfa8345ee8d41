"""REST API for the Weather Likelihood Platform"""
