"""Exceptions for use in Court Shuffle"""

# Court Shuffle
# Copyright (C) 2025  Court Shuffle developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


# ========== Base Application Exception ==========


class CourtShuffleException(Exception):
    """Base exception for all Court Shuffle errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Roster Exceptions ==========


class RosterException(CourtShuffleException):
    """Base exception for roster-related errors."""

    pass


class InvalidRosterException(RosterException):
    """Raised when the roster or court count cannot produce a round."""

    pass


class PlayerNotFoundException(RosterException):
    """Raised when a requested player cannot be found."""

    pass


# ========== Generation Exceptions ==========


class GenerationException(CourtShuffleException):
    """Base exception for round generation errors."""

    pass


class GenerationExhaustedException(GenerationException):
    """Raised when no team or match partition is found within the attempt budget."""

    pass


class PairingDeadlockException(GenerationExhaustedException):
    """Raised when the pair matcher stops making progress."""

    pass


class GenerationCancelledException(GenerationException):
    """Raised at a checkpoint when the caller cancelled the generation."""

    pass


# ========== Session Exceptions ==========


class SessionException(CourtShuffleException):
    """Base exception for play session errors."""

    pass


class RoundNotFoundException(SessionException):
    """Raised when a requested round does not exist."""

    pass


# ========== Worker Exceptions ==========


class WorkerException(CourtShuffleException):
    """Base exception for background worker errors."""

    pass


class WorkerBusyException(WorkerException):
    """Raised when a request arrives while another one is in flight."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CourtShuffleException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
