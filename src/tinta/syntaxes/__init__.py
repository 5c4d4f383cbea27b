"""Built-in syntax profiles.

``default.py`` holds the fallback profile used for unnamed, "html", and
failed requests. The ``syntax.<name>.py`` files are ordinary profile
resources: the registry finds them through the same naming convention as
user profiles, with this directory as the default base location.
"""
