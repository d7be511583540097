"""
Celestia feature modules.

- profiles: the ``users`` table, protected-field rules, birth details
- auth: token validation, the session container and its observer
- credits: balances, live subscriptions and admin grants
- personas: admin persona image validation, compression and upload
- routing: landing pages and the role guard

Cross-module calls go through the Protocols in each ``interfaces.py``.
"""
