"""
Database Service - per-server database provisioning for the hosting panel.

Servers own zero or more logical databases living on shared database hosts.
Each database gets a dedicated, randomly generated user restricted to a
remote-access pattern. This service validates quotas and names, provisions the
database and user on the host, and keeps the panel's records consistent with
the host even when a provisioning step fails part way.

Package Layout:
    - services: Name/credential generation and the provisioning services
    - database: Record-store repositories
    - clients: Database host gateway and its MySQL implementation
    - api: FastAPI endpoints
    - exceptions: Error taxonomy
    - main: FastAPI application

Example:
    ```bash
    uvicorn services.database_service.main:app --port 8004
    ```
"""
