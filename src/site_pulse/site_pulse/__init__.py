"""Site Pulse attendance package.

Organized by feature modules (identity, records, attendance, users) with a thin
Flask controller layer over service and repository layers. The attendance
reconciliation core (resolver, access filter, reconciler, aggregator) performs no I/O.
"""
