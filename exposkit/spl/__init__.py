"""SPL compiler: registers, paths, nodes, labels, scopes and XSM code generation."""