"""
Vitrine Backend: Services Layer
=================================

Service Inventory:
    - security:           PasswordHasher (bcrypt) and TokenService (JWT)
    - FileService:        image upload validation, storage and cleanup
    - SubmissionService:  contact form messages
    - AuthService:        login, admin registration, admin bootstrap
    - ProjectService:     portfolio projects with images
    - PackageService:     pricing catalog

Each module exposes a process-wide instance (e.g. `project_service`) that
routes call directly; tests construct their own with fakes.
"""
