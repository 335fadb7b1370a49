"""Result models"""
