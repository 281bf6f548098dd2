"""Application services.

Services implement release workflows, coordinating between the core types
and the external tools wrapped in platform/ and git/.
"""
