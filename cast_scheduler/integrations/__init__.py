"""
External collaborators of the scheduler
"""
from .company_directory import (
    CompanyDirectory,
    StaticCompanyDirectory,
    HttpCompanyDirectory,
    get_default_directory,
)

__all__ = [
    'CompanyDirectory',
    'StaticCompanyDirectory',
    'HttpCompanyDirectory',
    'get_default_directory',
]
