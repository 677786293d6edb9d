"""Career guidance API: profiles, assessments, skills, career and course recommendations."""

__version__ = "0.1.0"
