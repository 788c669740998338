"""SmartHR package.

Feature modules (auth, employees, leaves, payroll, billing, ...) each own a
model, a repository interface with a Firestore implementation, a service and a
thin Flask controller. ``container.py`` wires them together.
"""
