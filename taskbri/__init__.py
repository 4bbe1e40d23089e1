"""TaskBri project-tracking GraphQL backend."""
