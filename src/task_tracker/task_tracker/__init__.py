"""Task & attendance tracker package.

Organized by feature modules (users, tasks, timelogs, dashboard) with a thin
Flask controller layer over service/repository layers wired by `container`.
"""
