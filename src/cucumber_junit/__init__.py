"""cucumber-junit: convert Cucumber JSON reports to JUnit XML."""

__version__ = "1.0.0"
