"""
Site builder back end

Directory Structure:
├── routers/           # FastAPI route handlers (auth, projects, endpoints, ai, preview, health)
├── schemas/           # Pydantic models for API requests/responses (camelCase on the wire)
├── application/       # Ownership checks, project use cases, preview rendering, event handlers
├── domain/            # Errors, entity TypedDicts, ports, domain events
├── generation/        # Gemini client, prompts, fence stripping, Jinja2 fallback templates
├── storage/           # ProjectStorage interface with database and in-memory implementations
├── db/                # SQLAlchemy models, engine/session, database initialization
├── auth/              # OpenID Connect client and session user resolution
├── canvas/            # Undo/redo history and JSON-file persistence for the canvas
└── config.py          # Application configuration

Generation never fails a request: without a usable GEMINI_API_KEY, or when
the model errors, the static templates in generation/templates/ are served.
"""
