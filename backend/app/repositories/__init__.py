# Repositories package init
"""
Trainer API Backend: Repositories Layer
========================================

What:  Data access objects that own a MongoDB collection handle.
Why:   Routes depend on a repository object instead of a module-level
       collection global, which makes the storage swappable in tests.

Repository Inventory:
    - TrainerRepository: find-all, find-by-name, insert and delete-all
      over the `trainers` collection
"""
