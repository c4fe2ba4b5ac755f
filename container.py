"""
Repository Container - Centralized dependency injection container

Single place where repositories are bound to a DatabaseConnection.
"""

from repositories import CompanyRepository, JobRepository


class RepositoryContainer:
    """
    Container for repository instances with attribute access.
    """
    def __init__(self, db):
        self.companies = CompanyRepository(db)
        self.jobs = JobRepository(db)
