"""
Followers module.

- Follow / unfollow edges between users (duplicates and self-follow allowed)
- Followed-user id list
- Feed: recipes authored by followed users, newest first
"""
