"""Building blocks for filtering mail: matching, variables, pipes and helpers."""

__version__ = "3.24.0"
__all__ = ["config", "regexp", "textutil", "variables", "robust", "pipes",
           "fields", "recommend", "setid"]