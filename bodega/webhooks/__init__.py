"""
Module 'webhooks': réception des événements Stripe (signature, décodage en
variantes fermées, déduplication par event id) et dispatch vers inventory/payments.
"""
