"""Per-instrument evaluators.  Each one owns its rule and nothing else."""

from falls_rulesets.instruments.fast import FastEvaluator
from falls_rulesets.instruments.frat import FratEvaluator
from falls_rulesets.instruments.istumble import IstumbleEvaluator
from falls_rulesets.instruments.news2 import News2Evaluator

__all__ = [
    "FastEvaluator",
    "FratEvaluator",
    "IstumbleEvaluator",
    "News2Evaluator",
]
