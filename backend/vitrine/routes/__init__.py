"""
Vitrine Backend: API Routes Package
=====================================

Route Inventory:
    - submissions.py: POST   /api/contact
                      GET    /api/admin/submissions          (admin)
                      DELETE /api/admin/submissions/{id}     (admin)
    - auth.py:        POST   /api/auth/login | /register (admin) | /seed
    - projects.py:    GET    /api/projects
                      POST   /api/projects                   (admin, multipart)
                      DELETE /api/projects/{id}              (admin)
    - packages.py:    GET    /api/packages
                      POST   /api/packages/seed
                      PUT    /api/packages/{id}              (admin)
    - health.py:      GET    /health
    - pages.py:       GET    /{path}   catch-all, registered LAST

Routes stay thin: read the request, call a service, shape the response.
Admin routes declare `Depends(require_admin)`.
"""
