# COVID-19 Policy Response EDA
"""
COVID-19 Policy Response EDA
Exploratory analysis of confirmed cases against government response
indices at administrative level 2 (states / provinces).

Project Structure:
    covid_eda/
    ├── common/        - Shared utilities and error types
    ├── data/          - STAGE 1-2: Data loading, quality report, cleaning
    ├── analysis/      - STAGE 3: OLS regression and residuals
    └── visualization/ - STAGE 4: Descriptive and diagnostic figures
"""

__version__ = "0.1.0"
__author__ = "COVID EDA Team"
