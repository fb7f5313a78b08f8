"""
Core utilities.

- datauri: data URL <-> bytes helpers for image payloads
- serialization: PhotoRecord JSON / JSONL persistence

Import the submodules directly; models depend on ``datauri`` so this
package does not import ``serialization`` eagerly.
"""
