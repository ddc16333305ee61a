from .cases import SELF_TEST_CASES, run_self_test

__all__ = ["SELF_TEST_CASES", "run_self_test"]
