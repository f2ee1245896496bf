"""
Kotlin course - lesson catalog and learner progress tracking.

Loads the course's Markdown lessons into an ordered catalog and tracks
which lessons each learner has completed.
"""

__version__ = "0.1.0"
