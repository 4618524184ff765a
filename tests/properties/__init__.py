"""
Property-based testing using Hypothesis.

This package contains property tests that verify mathematical invariants
hold across randomly generated inputs. These tests are more comprehensive
than parameterized tests because they explore the full input space.

Modules:
    test_special_function_properties: normal CDF/inverse and Cholesky invariants
    test_payoff_properties: pathwise payoff identities (in-out parity, dominance)
    test_option_properties: closed-form bounds and parity
    test_greeks_properties: finite-difference Greek signs and ranges
    test_mc_properties: sampler pairing/strata and path positivity
"""
