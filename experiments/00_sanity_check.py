#!/usr/bin/env python3
"""
Experiment 00: Sanity Check

Quick verification that the project is set up correctly:
1. Config loads
2. Basic imports work
3. Cleaner runs on a tiny synthetic panel
4. Regression recovers a known linear model

Does not touch the network.

Usage:
    python experiments/00_sanity_check.py
"""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))


def check_config():
    """Test config loading."""
    print("Checking config...", end=" ")
    try:
        from covid_eda.config import load_config
        cfg = load_config()
        assert 'data' in cfg
        assert 'regression' in cfg
        print("✓")
        return True
    except Exception as e:
        print(f"✗ ({e})")
        return False


def check_imports():
    """Test key imports."""
    print("Checking imports...", end=" ")
    try:
        import pandas as pd
        import numpy as np
        import yaml
        import matplotlib
        import statsmodels.api as sm
        from covid19dh import covid19
        print("✓")
        return True
    except ImportError as e:
        print(f"✗ (Missing: {e})")
        return False


def check_cleaner():
    """Run the cleaner on the three-row example."""
    print("Checking cleaner...", end=" ")
    try:
        import numpy as np
        import pandas as pd
        from covid_eda.data.cleaning import clean_panel

        df = pd.DataFrame({
            'administrative_area_level_2': ['A', 'A', 'B'],
            'confirmed': [10, 20, np.nan],
            'deaths': [1, 2, 3],
            'recovered': [5, 10, 15],
            'tests': [100, np.nan, 300],
        })
        clean = clean_panel(df)
        assert len(clean) == 2
        assert list(clean['administrative_area_level_2']) == ['A', 'A']
        assert clean['tests'].notna().all()
        print("✓")
        return True
    except Exception as e:
        print(f"✗ ({e})")
        return False


def check_regression():
    """Fit a noise-free linear model and compare coefficients."""
    print("Checking regression...", end=" ")
    try:
        import numpy as np
        import pandas as pd
        from covid_eda.analysis.regression import fit_ols

        rng = np.random.default_rng(0)
        df = pd.DataFrame({
            'stringency_index': rng.uniform(0, 100, 50),
            'government_response_index': rng.uniform(0, 100, 50),
            'population': rng.integers(10_000, 1_000_000, 50),
        })
        df['confirmed'] = (5 + 2 * df['stringency_index']
                           - 3 * df['government_response_index']
                           + 0.01 * df['population'])
        result = fit_ols(df)
        assert abs(result.params['stringency_index'] - 2) < 1e-6
        assert abs(result.r_squared - 1.0) < 1e-9
        print("✓")
        return True
    except Exception as e:
        print(f"✗ ({e})")
        return False


def main():
    print("=" * 60)
    print("COVID-19 POLICY EDA - SANITY CHECK")
    print("=" * 60)
    
    checks = [
        ("Config", check_config),
        ("Imports", check_imports),
        ("Cleaner", check_cleaner),
        ("Regression", check_regression),
    ]
    
    results = []
    for name, check_fn in checks:
        results.append(check_fn())
    
    print("\n" + "=" * 60)
    passed = sum(results)
    total = len(results)
    
    if passed == total:
        print(f"ALL CHECKS PASSED ({passed}/{total}) ✓")
        print("Ready to run the analysis!")
    else:
        print(f"CHECKS FAILED ({passed}/{total}) ✗")
        print("Please fix issues before continuing.")
        sys.exit(1)


if __name__ == "__main__":
    main()
