"""
Personal CRM application package.

Holds the database models and the importer that replaces an account's data
with the contents of a Monica CRM SQL export.
"""
