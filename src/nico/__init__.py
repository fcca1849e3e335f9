"""nico: automated scaffolding & templating for multi-host Nix configurations."""
