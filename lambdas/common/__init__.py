# lambdas/common: code shared by the prompt generator, task distiller and request handler.
