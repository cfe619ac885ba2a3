"""Employee Records package.

Feature modules (employees, ...) keep a thin Flask controller layer on top of
service/repository layers that talk to MySQL through explicit SQL.
"""
