"""
Scan Data Collector Backend
===========================

This is the Python package for the backend API.

HOW IT'S ORGANIZED:
------------------
- models/    = Data structures (what does a reading look like?)
- services/  = Workers (talk to the database, resolve names, run voice commands)
- routers/   = API endpoints (the doors into our app)
- utils/     = Small validation helpers
- main.py    = Puts it all together and starts the server

Author: Scan Data Collector Team
"""
