"""Project Tracker package.

Feature modules (audit, capacity, tasks, timesheets, users) each keep their
own model/repository/service layers; Flask controllers stay thin.
"""
