"""Sample catalog for local development.

Written through the repositories so every project obeys the same
validation and role rules as API traffic. Only runs against an empty
catalog.
"""

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.app.core.logging import get_logger
from src.app.models import Project, Technology, User
from src.app.repositories import (
    AssociationRepository,
    ProjectRepository,
    TechnologyRepository,
    UserRepository,
)
from src.app.services.base import TransactionalService

logger = get_logger(__name__)

TECHNOLOGIES: list[tuple[str, str]] = [
    ("Rust", "Systems programming language focused on safety, speed, and concurrency"),
    ("Python", "High-level programming language known for simplicity and versatility"),
    ("JavaScript", "Programming language for web development and beyond"),
    ("TypeScript", "Typed superset of JavaScript for large-scale applications"),
    ("Go", "Statically typed, compiled language designed at Google"),
    ("Axum", "Ergonomic and modular web framework for Rust"),
    ("SQLx", "Async SQL toolkit for Rust with compile-time checked queries"),
    ("React", "JavaScript library for building user interfaces"),
    ("Next.js", "React framework for production-grade applications"),
    ("PostgreSQL", "Advanced open source relational database"),
    ("SQLite", "Lightweight, serverless SQL database engine"),
    ("Docker", "Platform for developing, shipping, and running applications in containers"),
    ("Kubernetes", "Container orchestration platform for automating deployment"),
    ("Redis", "In-memory data structure store used as database and cache"),
    ("GraphQL", "Query language for APIs and runtime for executing queries"),
    ("Tokio", "Asynchronous runtime for Rust"),
    ("FastAPI", "Modern, fast web framework for building APIs with Python"),
    ("Django", "High-level Python web framework"),
    ("Node.js", "JavaScript runtime built on Chrome V8 engine"),
    ("Express", "Minimal and flexible Node.js web application framework"),
]

USERS: list[tuple[str, str]] = [
    ("Alice Johnson", "alice.johnson@example.com"),
    ("Bob Smith", "bob.smith@example.com"),
    ("Charlie Brown", "charlie.brown@example.com"),
    ("Diana Prince", "diana.prince@example.com"),
    ("Eve Martinez", "eve.martinez@example.com"),
    ("Frank Zhang", "frank.zhang@example.com"),
    ("Grace Lee", "grace.lee@example.com"),
    ("Henry Wilson", "henry.wilson@example.com"),
]

# (name, description, repository_url, language, rating, technologies, users owner-first)
PROJECTS: list[tuple[str, str, str, str, float | None, list[str], list[str]]] = [
    (
        "Rust Web API Starter",
        "A production-ready starter template for building REST APIs with Rust, Axum, and SQLx.",
        "https://github.com/example/rust-web-api-starter",
        "Rust",
        4.8,
        ["Rust", "Axum", "SQLx", "SQLite", "Tokio"],
        ["Alice Johnson", "Bob Smith", "Charlie Brown"],
    ),
    (
        "E-commerce Platform",
        "Full-stack e-commerce platform with React frontend and Python FastAPI backend.",
        "https://github.com/example/ecommerce-platform",
        "Python",
        4.5,
        ["Python", "FastAPI", "React", "PostgreSQL", "Redis", "Docker"],
        ["Bob Smith", "Diana Prince", "Eve Martinez"],
    ),
    (
        "Task Management System",
        "Collaborative task management and project tracking built with Next.js and PostgreSQL.",
        "https://github.com/example/task-manager",
        "TypeScript",
        4.7,
        ["TypeScript", "Next.js", "PostgreSQL", "React"],
        ["Charlie Brown", "Alice Johnson"],
    ),
    (
        "Microservices Template",
        "Microservices architecture template using Go, Docker, and Kubernetes.",
        "https://github.com/example/microservices-template",
        "Go",
        4.9,
        ["Go", "Docker", "Kubernetes", "PostgreSQL"],
        ["Diana Prince", "Frank Zhang", "Grace Lee", "Henry Wilson"],
    ),
    (
        "Real-time Chat Application",
        "WebSocket-based real-time chat application with React frontend and Node.js backend.",
        "https://github.com/example/realtime-chat",
        "JavaScript",
        4.3,
        ["JavaScript", "Node.js", "Express", "React", "Redis"],
        ["Eve Martinez", "Bob Smith"],
    ),
    (
        "Machine Learning Pipeline",
        "End-to-end ML pipeline for training, evaluating, and deploying models.",
        "https://github.com/example/ml-pipeline",
        "Python",
        4.6,
        ["Python", "Docker"],
        ["Frank Zhang", "Diana Prince"],
    ),
    (
        "GraphQL API Server",
        "Flexible GraphQL API server with TypeScript, Apollo Server, and PostgreSQL.",
        "https://github.com/example/graphql-server",
        "TypeScript",
        4.4,
        ["TypeScript", "GraphQL", "PostgreSQL", "Node.js"],
        ["Grace Lee", "Charlie Brown", "Eve Martinez"],
    ),
    (
        "IoT Data Collector",
        "High-performance IoT data collection and processing system built with Rust.",
        "https://github.com/example/iot-collector",
        "Rust",
        4.9,
        ["Rust", "Tokio", "Redis", "Docker"],
        ["Henry Wilson", "Alice Johnson", "Frank Zhang"],
    ),
    (
        "Content Management System",
        "Headless CMS with Django backend and React admin interface.",
        "https://github.com/example/headless-cms",
        "Python",
        4.2,
        ["Python", "Django", "React", "PostgreSQL"],
        ["Alice Johnson", "Grace Lee"],
    ),
    (
        "Mobile Backend Service",
        "Backend-as-a-Service for mobile apps with authentication and push notifications.",
        "https://github.com/example/mobile-backend",
        "JavaScript",
        4.5,
        ["JavaScript", "Node.js", "Redis"],
        ["Bob Smith", "Henry Wilson"],
    ),
    (
        "Analytics Dashboard",
        "Real-time analytics dashboard with data visualization and reporting.",
        "https://github.com/example/analytics-dashboard",
        "TypeScript",
        None,
        ["TypeScript", "Next.js", "PostgreSQL"],
        ["Charlie Brown"],
    ),
    (
        "API Gateway",
        "High-performance API gateway with rate limiting and load balancing written in Rust.",
        "https://github.com/example/api-gateway",
        "Rust",
        None,
        ["Rust", "Tokio", "Redis"],
        ["Diana Prince", "Alice Johnson"],
    ),
]


async def _catalog_is_empty(session: AsyncSession) -> bool:
    for model in (Technology, User, Project):
        result = await session.execute(select(func.count()).select_from(model))
        if result.scalar_one() > 0:
            return False
    return True


async def seed_sample_data(session: AsyncSession) -> bool:
    """Insert the sample catalog if no technology, user or project exists yet.

    The whole catalog is written in one transaction, so a failure part way
    through leaves the database as it was.

    Returns:
        True if data was inserted, False if the catalog was not empty.
    """
    if not await _catalog_is_empty(session):
        logger.info("Skipping sample data, catalog is not empty")
        return False

    technology_repo = TechnologyRepository(session)
    user_repo = UserRepository(session)
    project_repo = ProjectRepository(session)
    association_repo = AssociationRepository(session)

    async with TransactionalService(session).transaction("seed_sample_data"):
        technologies = {
            name: Technology(name=name, description=description)
            for name, description in TECHNOLOGIES
        }
        for technology in technologies.values():
            technology_repo.add(technology)

        users = {name: User(name=name, email=email) for name, email in USERS}
        for user in users.values():
            user_repo.add(user)
        await session.flush()

        for name, description, url, language, rating, tech_names, user_names in PROJECTS:
            project = await project_repo.insert(
                {
                    "name": name,
                    "description": description,
                    "repository_url": url,
                    "language": language,
                    "rating": rating,
                }
            )
            await association_repo.replace_technologies(
                project.id, [technologies[t].id for t in tech_names]
            )
            await association_repo.replace_users(project.id, [users[u].id for u in user_names])

    logger.info(
        "Sample data loaded",
        technologies=len(TECHNOLOGIES),
        users=len(USERS),
        projects=len(PROJECTS),
    )
    return True
