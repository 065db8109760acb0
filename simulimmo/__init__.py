"""
simulimmo - Real Estate Simulation Core

Financial calculation engine behind the real-estate simulator: loan
amortization, borrowing capacity, rental tax regimes, yields and
multi-year projections.

Modules:
    - core: Exceptions, logging, settings and formatting helpers
    - domain: Pydantic data models and pure calculators
    - application: Projection engine, city data and simulation services
"""

__version__ = "1.0.0"
