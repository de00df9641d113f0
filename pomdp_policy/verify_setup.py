#!/usr/bin/env python3
"""Verify that the pomdp_policy environment is set up correctly."""

import sys
from importlib import import_module

def check_imports():
    """Check that all required modules can be imported and a default policy samples."""
    required_modules = [
        ('numpy', 'NumPy'),
        ('matplotlib', 'Matplotlib'),
    ]

    project_modules = [
        ('pomdp_policy.Models', 'Models'),
        ('pomdp_policy.Policies', 'Policies'),
        ('pomdp_policy.MonteCarlo', 'MonteCarlo'),
    ]

    print("Checking dependencies...")
    print("-" * 50)

    all_ok = True
    for module_name, display_name in required_modules:
        try:
            mod = import_module(module_name)
            version = getattr(mod, '__version__', 'unknown')
            print(f"✓ {display_name:20s} (version {version})")
        except ImportError as e:
            print(f"✗ {display_name:20s} MISSING")
            print(f"  Error: {e}")
            all_ok = False

    print()
    print("Checking project modules...")
    print("-" * 50)

    for module_name, display_name in project_modules:
        try:
            import_module(module_name)
            print(f"✓ {display_name}")
        except ImportError as e:
            print(f"✗ {display_name} FAILED")
            print(f"  Error: {e}")
            all_ok = False

    if all_ok:
        print()
        print("Checking default policy...")
        print("-" * 50)
        from pomdp_policy import Policy
        from pomdp_policy.Models import uniform_belief

        policy = Policy(2, 3, 2)
        probs = policy.get_action_probabilities(uniform_belief(2))
        if abs(probs.sum() - 1.0) < 1e-9:
            print(f"✓ Uniform policy distribution {probs.round(3).tolist()}")
        else:
            print(f"✗ Uniform policy distribution sums to {probs.sum()}")
            all_ok = False

    print()
    print("-" * 50)
    if all_ok:
        print("✓ All checks passed! Environment is ready.")
        return 0
    else:
        print("✗ Some checks failed. Please review errors above.")
        return 1

if __name__ == "__main__":
    sys.exit(check_imports())
