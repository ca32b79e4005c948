"""Task management API with role-scoped task queries and dashboard analytics"""
