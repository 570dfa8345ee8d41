"""Weather Likelihood Platform"""
