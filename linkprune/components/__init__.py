"""Components layer - the algorithmic core.

This layer contains the modules that do the actual work:
- Parsing TypeScript into syntax trees and scanning annotated classes
- Extracting, resolving and serializing deep link routes
- Patching the registration site byte for byte
- Pruning the import graph and rewriting purged imports

Components are leaf modules that:
- Do NOT import services, workflows, or interfaces
- ARE imported and used BY workflows
- May import from: helpers, other components

Architecture:
- helpers/ = stdlib-only utilities and DTOs (pure, stateless)
- components/ = domain logic building blocks (this layer)
- workflows/ = orchestration of components over a file store
- services/ = configuration
- interfaces/ = CLI presentation
"""
