"""External collaborators used by LocalLens.

Location providers resolve the caller's coordinates; description providers
turn an image into a lowercase keyword string.
"""
