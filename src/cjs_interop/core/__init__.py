"""
Core transform pipeline.

Modules:
    - ``patterns``: Pattern Compiler.
    - ``classifier``: Module Classifier and shared matcher caches.
    - ``metadata``: File Metadata Store.
    - ``specifiers``: Specifier Analyzer.
    - ``rewriter``: Import Rewriter.
    - ``reporter``: Run Reporter.
    - ``nodes``, ``parser``, ``scope``: JavaScript AST support.
    - ``engine``: Per-file orchestration.
"""
