from __future__ import annotations

# AWS control-plane calls (describe, register, update-service)
AWS_TIMEOUT_SECONDS = 60.0

# ECR token fetch and docker login
LOGIN_TIMEOUT_SECONDS = 60.0

# docker tag is local and fast
DOCKER_TAG_TIMEOUT_SECONDS = 30.0
