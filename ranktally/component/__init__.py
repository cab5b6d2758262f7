'''Reusable building blocks of the tallying engines.'''
